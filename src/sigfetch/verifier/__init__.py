"""Signature and checksum verifiers"""
