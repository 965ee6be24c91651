"""
Benchmark suite for php_literal_parser performance.

Compares PHP literal parsing against decoding the same payload as JSON with:
- Python standard library json
- orjson (C-optimized)

Run with ``pytest benchmarks`` after installing the ``bench`` extra.
"""
