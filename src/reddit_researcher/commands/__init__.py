"""Click commands for reddit-researcher"""
