"""
FoodMate 餐品订购平台后端
"""

__version__ = "1.0.0"
