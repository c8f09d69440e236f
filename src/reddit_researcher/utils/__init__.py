"""Shared helpers: config, HTTP client, pacing, extraction and output"""
