"""Hospital operations API - appointments, patients and tenant catalogs"""
