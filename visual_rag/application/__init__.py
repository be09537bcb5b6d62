"""
Application layer: use-case services orchestrating core components and
boundary adapters.
"""
