"""LLM integration layer.

This package is intentionally small:
- No prompt/output logging (questions and birth data are personal).
- Configured once at startup from `Settings`.
- One bounded call per inbound request, no retries.
"""
