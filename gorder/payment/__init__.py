"""The payment service: payment links for new orders and the created-order consumer."""