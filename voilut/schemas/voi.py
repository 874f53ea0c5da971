"""
VOI 相关数据模型
"""
from typing import Tuple
import numpy as np
from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt, field_validator


class WindowSettings(BaseModel):
    """窗宽窗位"""
    model_config = ConfigDict(frozen=True)
    
    width: float = Field(..., gt=0, description="窗宽")
    center: float = Field(..., description="窗位")


class DeviceLUT(BaseModel):
    """设备 VOI LUT (已解析到内存)"""
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "firstValueMapped": 100,
                "lut": [0, 1024, 2048, 4095]
            }
        }
    )
    
    first_value_mapped: int = Field(..., alias="firstValueMapped", description="lut[0] 对应的模态值")
    lut: Tuple[NonNegativeInt, ...] = Field(..., min_length=1, description="查找表数据")
    
    @field_validator("lut", mode="before")
    @classmethod
    def _from_ndarray(cls, value):
        if isinstance(value, np.ndarray):
            return value.tolist()
        return value
    
    @property
    def last_value_mapped(self) -> int:
        """查找表最后一项对应的模态值"""
        return self.first_value_mapped + len(self.lut) - 1
