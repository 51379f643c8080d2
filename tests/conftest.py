import os

# Keep the import-time app from writing log files during tests
os.environ["LOG_FILE"] = ""
