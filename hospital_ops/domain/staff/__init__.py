"""Staff accounts: admins, system admins and doctors"""
