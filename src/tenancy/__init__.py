"""
Tenancy bounded context
Hostname → DomainConfig resolution, navigation and route policy, visit tracking
"""
