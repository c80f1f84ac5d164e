"""
Sequence augmentor tests.

Tests for the stream-side components:
- Value source resolution
- starts_with / ends_with / next / always operators
"""
