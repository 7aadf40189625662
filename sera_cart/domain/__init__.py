"""
Domain layer

Cart engine, value objects and the entities it reads.
"""
