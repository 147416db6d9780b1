"""
Reseller License Service Django project.
"""
