"""Package-ecosystem drivers."""
