from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from datetime import datetime
from typing import List, Optional

class TransactionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    title: str = ""
    description: str = ""
    price: float
    date_of_sale: datetime = Field(
        validation_alias=AliasChoices("date_of_sale", "dateOfSale"),
        serialization_alias="dateOfSale",
    )
    category: Optional[str] = None
    sold: bool
    image: Optional[str] = None

class Statistics(BaseModel):
    totalSaleAmount: float = 0
    totalSoldItems: int = 0
    totalNotSoldItems: int = 0

class PriceRangeCount(BaseModel):
    range: str
    count: int

class CategoryCount(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    category: Optional[str] = Field(alias="_id")
    count: int

class CombinedData(BaseModel):
    transactions: List[TransactionOut]
    statistics: Statistics
    barChartData: List[PriceRangeCount]
    pieChartData: List[CategoryCount]
