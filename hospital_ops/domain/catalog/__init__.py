"""Catalog domain - Tenant scan types and departments"""
