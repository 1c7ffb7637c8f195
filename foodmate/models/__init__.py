"""
领域模型：枚举、状态规则和数据规范化
"""
