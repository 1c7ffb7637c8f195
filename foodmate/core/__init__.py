"""
核心基础设施：存储、安全、异常与错误处理
"""
