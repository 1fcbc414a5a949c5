from typing import NewType

ProducerName = NewType('ProducerName', str)
GoodsName = NewType('GoodsName', str)
CarrierName = NewType('CarrierName', str)
