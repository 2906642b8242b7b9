"""Amine Buddy: a portfolio assistant answering questions about Amine.

Retrieval-augmented answers from a pgvector knowledge base, keyword page
suggestions, an HTTP streaming server and a terminal chat widget.
"""

__version__ = "0.1.0"
