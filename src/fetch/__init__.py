"""Verified download layer.

This module streams cache resources onto local storage atomically
and checks content digests before anything becomes visible.
"""
