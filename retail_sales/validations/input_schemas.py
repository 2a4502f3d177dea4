from datetime import date, time

from pandera.pandas import Check, Column, DataFrameSchema

# Money amounts: non-negative and finite
FINITE_AMOUNT = Check.in_range(0, float("inf"), include_max=False)


sales_schema = DataFrameSchema(
    {
        # Identity key: bulk insert aborts on a null or repeated id
        "transactions_id": Column("Int64", nullable=False, unique=True),

        # Sale timing (parsed by the loader, may still be missing)
        "sale_date": Column(checks=Check(lambda v: isinstance(v, date), element_wise=True), nullable=True),
        "sale_time": Column(checks=Check(lambda v: isinstance(v, time), element_wise=True), nullable=True),

        # Customer
        "customer_id": Column("Int64", nullable=True),
        "gender": Column(str, nullable=True),
        "age": Column("Int64", Check.ge(0), nullable=True),

        # Line item
        "category": Column(str, nullable=True),
        "quantity": Column("Int64", Check.gt(0), nullable=True),
        "price_per_unit": Column(float, FINITE_AMOUNT, nullable=True),
        "cogs": Column(float, FINITE_AMOUNT, nullable=True),
        "total_sale": Column(float, FINITE_AMOUNT, nullable=True),
    },
    strict=True,
    ordered=True,
)
