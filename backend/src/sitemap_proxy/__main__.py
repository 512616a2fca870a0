from sitemap_proxy.main import main

main()
