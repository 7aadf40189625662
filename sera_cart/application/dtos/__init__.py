"""Application DTOs"""
