"""XML device description documents. XPath addressing and targeted document
mutations.
"""
