"""Application layer: interfaces, search engine, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (record source).
"""
