class SearchStore:
    """
    Holds the current product search query.
    Filtering itself is done by the listing view, see utils.pure.filter_products.
    """

    def __init__(self) -> None:
        self.query = ""

    def update_search(self, query: str) -> None:
        self.query = query

    def clear_search(self) -> None:
        self.query = ""
