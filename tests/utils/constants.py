# tests/utils/constants.py

DEFAULT_TEST_LOG_LEVEL = "debug"
