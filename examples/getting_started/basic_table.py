"""Getting started with hashgrid.

This example walks through the main Table operations:
1. Building a table incrementally and out of order
2. Reading cells and whole rows
3. Removing rows and columns
4. Encoding the table and moving it to pandas
"""

from hashgrid import Table, decode, encode, get_logger, to_dataframe

# Set up logging
logger = get_logger(__name__)


def build_table() -> Table:
    """Record a few sensor readings, some of them late or incomplete."""
    table = Table()
    table.push_row({"sensor": "north", "temp": 12.5})
    table.push_row({"sensor": "south", "temp": 14.0, "humidity": 0.61})
    # A reading for row 4 arrives before rows 2 and 3.
    table.set("sensor", 4, "west")
    table.set("temp", 2, 11.8)
    return table


def main():
    table = build_table()
    logger.info("Built %r", table)

    for position, row in enumerate(table):
        logger.info("row %d: %s", position, row)

    logger.info("humidity of row 0: %s", table.get("humidity", 0))

    removed = table.remove_row(1)
    logger.info("Removed %s; west is now row %d", removed, table.row_count - 1)

    table.remove_column("humidity")
    restored = decode(encode(table))
    logger.info("Round trip preserved the table: %s", restored == table)

    print(to_dataframe(table))


if __name__ == "__main__":
    main()
