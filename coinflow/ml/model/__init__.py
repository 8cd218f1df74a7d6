"""Market data types and model configuration."""