"""
Infrastructure layer for the task approval view service.

This layer contains the implementation details behind the domain interfaces:
- HTML rendering (Jinja2 templates)
- Assignment update handling
- DTO to domain mapping
- Web routers and middleware (FastAPI)

The infrastructure layer implements interfaces defined in the domain layer,
following the Dependency Inversion Principle of Clean Architecture.
"""
