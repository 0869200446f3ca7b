"""
Test suite for the survey responses service.

Test Structure:
- test_schema.py: Schema registry order and lookups
- test_submission.py: Tagged values and request body parsing
- test_normalizer.py: Normalization and label mapping
- test_csv_export.py: Cell escaping and CSV rendering
- test_storage.py: JSON lines and SQLite stores
- test_collector.py: Submission and export workflow
- test_web.py: Flask routes
- test_cli.py: Command line interface
- test_config.py: Environment configuration

Run all tests:
    pytest tests/ -v
"""
