"""Data models"""
