"""
用户相关数据模型
"""

from enum import Enum


class UserRole(str, Enum):
    """用户角色枚举"""
    NONE = "none"      # 普通买家
    CHEF = "chef"      # 厨师（卖家）
    ADMIN = "admin"    # 管理员


class UserStatus(str, Enum):
    """角色申请状态枚举"""
    NONE = "none"            # 未申请
    REQUESTED = "requested"  # 已申请，待审批
    ACTIVE = "active"        # 已授予
