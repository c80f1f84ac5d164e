"""Tests for the sequence property checks."""
