"""Mirror orchestration layer.

This module discovers the reference closure of a root set, drives
narinfo resolution in bounded waves, and exposes the sync SDK.
"""
