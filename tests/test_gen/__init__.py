"""Tests for the sequence generators."""
