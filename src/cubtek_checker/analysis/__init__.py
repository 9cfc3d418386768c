"""Lexical helpers shared by the rules: regex patterns and brace scanning."""

from .patterns import (
    FUNCTION_SIGNATURE,
    GLOBAL_DECLARATION,
    INCLUDE_DIRECTIVE,
    clean_code_for_analysis,
    is_camel_case,
    is_pascal_case,
    iter_function_signatures,
    iter_global_declarations,
    looks_like_function_signature,
    looks_like_global_declaration,
)
from .scanner import brace_depth_before_line, find_block_end, iter_line_depths

__all__ = [
    "FUNCTION_SIGNATURE",
    "GLOBAL_DECLARATION",
    "INCLUDE_DIRECTIVE",
    "brace_depth_before_line",
    "clean_code_for_analysis",
    "find_block_end",
    "is_camel_case",
    "is_pascal_case",
    "iter_function_signatures",
    "iter_global_declarations",
    "iter_line_depths",
    "looks_like_function_signature",
    "looks_like_global_declaration",
]
