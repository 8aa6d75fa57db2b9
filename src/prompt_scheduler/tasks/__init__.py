"""
Task subsystem.

Components:
- task_models.py: data structures (ScheduledTask, TaskScope, PromptSource, CreateTaskInput)
- cron.py: cron validation + next occurrence (croniter)
- cron_builder.py: build/parse/describe the common cron shapes
- migrations.py: persisted record schema migrations
- scope.py: workspace-scope eligibility
- task_store.py: in-memory CRUD over a durable record store
- task_scheduler.py: minute-aligned polling loop that dispatches due tasks
"""
