"""
Business data knowledge base: loading, formatting and rendering of the
marketing, purchase order and sales order datasets.
"""
