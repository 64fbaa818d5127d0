"""
PDF 签署字段定位 - 后端核心模块

模块结构：
- config/     字段规则与运行期配置
- models/     数据模型定义
- geometry/   坐标换算、字段几何、动态字号
- session/    文档编辑会话
- pipeline/   定稿组装与执行、会话管理
- render/     视口提供者与渲染后端实现
"""

__version__ = "0.1.0"
