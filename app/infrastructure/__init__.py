"""
Infrastructure layer for the Time Manager API.

This layer contains the implementation details for external systems integration:
- Data store (Supabase / PostgREST)
- Authentication (Supabase Auth)
- Web layer (routers, middleware, response envelopes)

The infrastructure layer implements interfaces defined in the domain layer,
following the Dependency Inversion Principle of Clean Architecture.
"""
