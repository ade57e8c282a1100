"""Persistence-backed operations shared by the API routers"""
