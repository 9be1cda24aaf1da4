"""
Pytest configuration.
Sets the testing environment before the app and its engine are imported.
"""
import os

os.environ["TESTING"] = "True"
os.environ["DEBUG"] = "False"
os.environ.setdefault("LOG_LEVEL", "INFO")
