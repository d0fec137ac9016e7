"""
Locust scenario user classes.

Each module in this package defines Locust ``HttpUser`` subclasses that
model a traffic pattern against the task manager:

- :mod:`.task_types` — the full task-type lifecycle (create, read,
  list, delete) once per iteration

All concrete scenarios inherit from :class:`.base.TaskManagerUser`,
which wires the target host, think-time and configuration profile.
"""
