"""Core logic for JSON Schema Resolver.

The Gradio UI lives in `app.py`. This package contains the pieces that:
- classify schema nodes and merge composed fragments
- build flattened object definitions (`object_definition`)
- extract representative example values (`example_extractor`)
- format examples and cURL commands for display
"""
