"""Test suite for the citation validation engine.

Unit tests cover the citation model, the rule checkers, scoring,
classification and the uncertainty analyzer; integration tests run raw
records through validation, analysis, export and reporting. To run the
tests, execute `pytest` from the project root.
"""
