"""Experiment module package for benchmarking the optimizers.

Provides utilities to generate run configurations, execute them, and persist run-level results.
"""
