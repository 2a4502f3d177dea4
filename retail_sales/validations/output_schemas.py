from datetime import time

import pandera.pandas as pa
from pandera.pandas import Check, Column, DataFrameSchema

# Money amounts: non-negative and finite
FINITE_AMOUNT = Check.in_range(0, float("inf"), include_max=False)


sales_clean_schema = DataFrameSchema(
    {
        # Identifiers
        "transactions_id": Column(int, nullable=False, unique=True),
        "customer_id": Column("Int64", nullable=False),

        # Date dimensions
        "sale_date": Column(pa.Date, nullable=False),
        "sale_time": Column(checks=Check(lambda v: isinstance(v, time), element_wise=True), nullable=False),

        # Customer attributes
        "gender": Column(str, nullable=False),
        "age": Column("Int64", Check.ge(0), nullable=False),

        # Measures
        "category": Column(str, nullable=False),
        "quantity": Column("Int64", Check.gt(0), nullable=False),
        "price_per_unit": Column(float, FINITE_AMOUNT, nullable=False),
        "cogs": Column(float, FINITE_AMOUNT, nullable=False),
        "total_sale": Column(float, FINITE_AMOUNT, nullable=False),
    },
    strict=True
)
