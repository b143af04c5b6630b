"""
Client for the remote scheduling API.
"""
