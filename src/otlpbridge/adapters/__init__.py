"""Adapters: vendor record mappers and logging setup."""
