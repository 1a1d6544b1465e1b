"""
Test suites package.

Kept importable so that:
  - page objects and the framework can be imported as `testsuites.ui_testing...`
  - `run_tests.py` and CI can address suites by module path
"""
