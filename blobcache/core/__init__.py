"""Core Layer:

Application services and the command handler. Depends only on domain
interfaces; concrete adapters are injected by main.py.
"""
