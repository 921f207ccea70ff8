"""
HotelHub 酒店资料录入后端
"""
__version__ = "1.0.0"
