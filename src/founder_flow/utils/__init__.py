"""Link normalization, classification and validation utilities"""
