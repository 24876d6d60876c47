"""HTTP transport for walletflow."""
