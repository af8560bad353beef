"""
Task subsystem.

Components:
- task_models.py: data structures (Task, Priority, Category) and the record codec
- task_store.py: ordered task list persisted to key-value storage
- dates.py: date/time parsing, formatting and due-date status
- views.py: derived views (today's schedule, folders, calendar)
- task_api.py: user intents (create/edit/toggle/delete, selection)
"""
