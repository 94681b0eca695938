"""
The `storage` package persists uploaded files (book PDFs and posters, profile
photos) on local disk and derives their public URLs. See `storage.files`.
"""
