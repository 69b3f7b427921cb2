"""
Core module - configuration, constants and the CredentialService facade
"""
