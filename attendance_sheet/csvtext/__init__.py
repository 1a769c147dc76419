from .tokenizer import RawRow, is_blank_row, tokenize

__all__ = ["RawRow", "is_blank_row", "tokenize"]
