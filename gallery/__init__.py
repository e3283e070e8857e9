"""Gallery storefront API"""
