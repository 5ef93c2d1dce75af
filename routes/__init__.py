def register_routes(app):
    from products.product_routes import bp as product_bp
    app.register_blueprint(product_bp, url_prefix="/products")

    from customers.customer_routes import bp as customer_bp
    app.register_blueprint(customer_bp, url_prefix="/customers")

    from invoices.invoice_routes import bp as invoice_bp
    app.register_blueprint(invoice_bp, url_prefix="/invoices")

    from reports.report_routes import bp as report_bp
    app.register_blueprint(report_bp, url_prefix="/reports")

    from settings.settings_routes import bp as settings_bp
    app.register_blueprint(settings_bp, url_prefix="/settings")
