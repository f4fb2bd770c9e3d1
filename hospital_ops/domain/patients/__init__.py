"""Patient domain - Patient registry"""
