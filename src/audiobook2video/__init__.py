# -*- coding: utf-8 -*-
"""audiobook2video：有声书 -> 分段(section) -> 分镜(shot) -> 图像/视频 的流水线。"""

__version__ = "0.1.0"
