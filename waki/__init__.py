"""Waki morning companion backend."""
