"""
Task subsystem.

Components:
- task_models.py: data structures (Task, Person, Predecessor, field registry)
- equality.py: per-kind change detection
- identity.py: account name -> site identity resolution
- field_codec.py: UI field -> remote list field encoding
- status.py: status derived from the completion toggle
- reconciler.py: validate -> resolve -> encode -> persist -> merge
- board.py: caller-side owner of the task snapshot
"""
