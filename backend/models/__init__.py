# Importing the modules registers every table in Base.metadata
from models import users, category, product, cart, log  # noqa: F401
