"""Test suite for nix-mirror."""
