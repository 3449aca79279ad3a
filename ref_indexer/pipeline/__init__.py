from .receipt_pipeline import ReceiptPipeline, ReceiptSummary
