"""
UI testing package: framework, page objects and browser suites for SauceDemo.
"""
