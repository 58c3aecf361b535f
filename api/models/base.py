from sqlalchemy.orm import declarative_base

# Define the declarative base
Base = declarative_base()
