"""Administrative backend for an education consultancy."""
