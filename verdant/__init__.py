"""
Verdant: token-reducing compression of markdown documentation trees.

Packs a set of text documents into a compact annotated markdown stream or the
VRD format so the result fits into a large-language-model context window.
"""

__version__ = "2.3.0"
