"""
Domain layer: command execution and file transfer
"""
