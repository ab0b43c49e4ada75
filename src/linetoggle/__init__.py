"""linetoggle: line-addressed comment, block-delimiter and indentation toggling."""

__version__ = "0.1.0"
