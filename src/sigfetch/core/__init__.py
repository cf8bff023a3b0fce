"""Core helpers"""
