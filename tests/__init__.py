"""
Test suite for the task manager performance package.

This package contains:
- unit/: offline tests for config, matching, steps, users and the
  threshold gate, using fake Locust responses
- smoke/: a live create/read/list/delete pass against TASK_MANAGER_API
"""
