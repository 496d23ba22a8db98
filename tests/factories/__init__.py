"""Test doubles and factories."""
