"""Integration test package.

These tests run raw records through validation, uncertainty analysis,
export and console reporting. They touch only the local filesystem
through pytest's ``tmp_path``.
"""
