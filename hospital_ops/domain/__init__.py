"""Domain packages - one per resource, each with repository, service, router and schemas"""
