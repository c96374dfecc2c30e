"""Narinfo metadata layer.

This module parses narinfo documents and resolves one package id into
its locally mirrored metadata, content blob, and reference set.
"""
