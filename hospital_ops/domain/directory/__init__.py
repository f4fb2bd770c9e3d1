"""Directory domain - Staff, branch, robot and doctor lookups within a tenant"""
