"""Lox language package.

A tree-walk interpreter for Lox: lexer, recursive-descent parser, static
scope resolver, interpreter and runtime object model, plus a language
server for editors.


File: __init__.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""
