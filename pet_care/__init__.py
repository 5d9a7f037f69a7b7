"""宠物照护提醒：本地记录存储与提醒通知。"""
__version__ = "0.1.0"
