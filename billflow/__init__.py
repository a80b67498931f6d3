"""BillFlow - GST tax invoice service"""
