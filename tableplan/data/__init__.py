"""Reference data"""
