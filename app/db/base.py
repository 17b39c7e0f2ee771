from sqlalchemy.orm import declarative_base

Base = declarative_base()

# Models register themselves on import; app.db.models pulls them all in
# before create_all() or an Alembic autogenerate run.
