PAGE_OFFSET = 12  # 4 KB pages
ADDRESS_BITS = 32
NUM_PAGES = 1 << (ADDRESS_BITS - PAGE_OFFSET)


def page_number(address):
    if not 0 <= address < (1 << ADDRESS_BITS):
        raise ValueError(f"Address out of 32-bit range: {address:#x}")
    return address >> PAGE_OFFSET


class PageTable:
    """Maps page id -> frame id. A missing key means the page is not resident."""

    def __init__(self, num_pages=NUM_PAGES):
        self.num_pages = num_pages
        self.entries = {}

    def check_page(self, page):
        if not 0 <= page < self.num_pages:
            raise ValueError(f"Page id out of range: {page}")

    def lookup(self, page):
        self.check_page(page)
        return self.entries.get(page)

    def map(self, page, frame):
        self.check_page(page)
        self.entries[page] = frame

    def unmap(self, page):
        return self.entries.pop(page)

    def items(self):
        return self.entries.items()

    def __contains__(self, page):
        return page in self.entries

    def __len__(self):
        return len(self.entries)
