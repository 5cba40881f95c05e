"""
Service layer: business operations over the record repositories.
"""
