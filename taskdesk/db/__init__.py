"""TaskDesk persistence — SQLAlchemy base, session helpers and the task store."""
