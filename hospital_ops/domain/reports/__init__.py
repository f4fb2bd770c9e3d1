"""Scan reports written by doctors for appointments"""
