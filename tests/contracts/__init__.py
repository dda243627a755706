"""Tests for the contracts package.

Contract types are leaf definitions shared by collectors, sinks and the
engine. These tests cover their guarantees, not any implementation.
"""
