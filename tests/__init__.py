"""
測試套件
"""
