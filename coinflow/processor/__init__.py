"""Processing-stage wrappers and the trading strategy."""