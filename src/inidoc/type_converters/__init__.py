"""Conversion between stored strings and typed values."""
