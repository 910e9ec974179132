from typing import NamedTuple


class MemoryTable(NamedTuple):
    table_name: str
    type: str


PRICE_INQUIRY_MEMORY = MemoryTable(table_name='0x_price_inquiries', type='price_inquiry')

ZERO_EX_API_KEY_SETTING = 'ZERO_EX_API_KEY'
