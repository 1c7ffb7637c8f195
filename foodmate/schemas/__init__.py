"""
请求/响应模式
"""
