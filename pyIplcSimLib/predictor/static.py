# File: pyIplcSimLib/predictor/static.py
# --------------------------------------------------------------------
# Static branch predictor: every branch is predicted the same way.
#
# Date  \ 19 Oct 2026

class StaticPredictor:
    def __init__(self, predict_taken=False):
        self.predict_taken = bool(predict_taken)

    def predict(self, pc: int) -> bool:
        return self.predict_taken

    def __repr__(self):
        return f"StaticPredictor({'taken' if self.predict_taken else 'not-taken'})"
