"""Lexing, parsing and evaluation."""
