"""
Rules — load factory rule declarations and run them.
"""
